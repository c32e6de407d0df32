"""
Built-in questions used when AI generation is unavailable, plus the static
topic lists served by the battle endpoints.
"""

from __future__ import annotations

POINTS_BY_DIFFICULTY = {"easy": 5, "medium": 10, "hard": 15}


def _question(qid, question, options, correct, explanation, subject, subtopic, difficulty):
    return {
        "id": qid,
        "question": question,
        "options": options,
        "correct_answer": correct,
        "explanation": explanation,
        "subject": subject,
        "subtopic": subtopic,
        "difficulty": difficulty,
        "points": POINTS_BY_DIFFICULTY[difficulty],
    }


DAILY_QUESTIONS = [
    _question(
        "hist1",
        "Who founded the Mauryan Empire?",
        ["Chandragupta Maurya", "Ashoka", "Bindusara", "Kautilya"],
        0,
        "Chandragupta Maurya founded the Mauryan Empire in 321 BCE with the help of Kautilya (Chanakya).",
        "History",
        "Ancient India",
        "easy",
    ),
    _question(
        "hist2",
        "In which year did the Jallianwala Bagh massacre take place?",
        ["1918", "1919", "1920", "1921"],
        1,
        "The Jallianwala Bagh massacre occurred on April 13, 1919, in Amritsar, Punjab.",
        "History",
        "Freedom Movement",
        "medium",
    ),
    _question(
        "hist3",
        "Who was known as the 'Iron Man of India'?",
        ["Jawaharlal Nehru", "Sardar Vallabhbhai Patel", "Subhas Chandra Bose", "Bhagat Singh"],
        1,
        "Sardar Vallabhbhai Patel was known as the 'Iron Man of India' for his role in uniting the princely states.",
        "History",
        "Freedom Fighters",
        "easy",
    ),
    _question(
        "hist4",
        "At what age was Bhagat Singh executed?",
        ["21", "22", "23", "24"],
        2,
        "Bhagat Singh was executed at the young age of 23 on March 23, 1931, along with Rajguru and Sukhdev.",
        "History",
        "Freedom Fighters",
        "medium",
    ),
    _question(
        "pol1",
        "Which article of the Indian Constitution was related to Jammu and Kashmir's special status?",
        ["Article 356", "Article 370", "Article 371", "Article 372"],
        1,
        "Article 370 granted special autonomous status to Jammu and Kashmir, which was abrogated in August 2019.",
        "Polity",
        "Constitutional Provisions",
        "medium",
    ),
    _question(
        "pol2",
        "How many fundamental rights are guaranteed by the Indian Constitution?",
        ["5", "6", "7", "8"],
        1,
        "The Indian Constitution guarantees 6 fundamental rights after the 44th Amendment removed the Right to Property.",
        "Polity",
        "Fundamental Rights",
        "medium",
    ),
    _question(
        "pol3",
        "Who is known as the 'Father of the Indian Constitution'?",
        ["Mahatma Gandhi", "Dr. B.R. Ambedkar", "Jawaharlal Nehru", "Sardar Patel"],
        1,
        "Dr. B.R. Ambedkar is known as the 'Father of the Indian Constitution' for his role as chairman of the drafting committee.",
        "Polity",
        "Constitutional History",
        "easy",
    ),
    _question(
        "pol4",
        "Which amendment is known as the 'Mini Constitution'?",
        ["42nd Amendment", "44th Amendment", "52nd Amendment", "73rd Amendment"],
        0,
        "The 42nd Amendment (1976) is called the 'Mini Constitution' due to its extensive changes to the Constitution.",
        "Polity",
        "Constitutional Amendments",
        "hard",
    ),
    _question(
        "geo1",
        "Which is the highest peak in India?",
        ["K2", "Kanchenjunga", "Nanda Devi", "Mount Everest"],
        1,
        "Kanchenjunga (8,586m) is the highest peak entirely within India, located on the India-Nepal border.",
        "Geography",
        "Physical Features",
        "medium",
    ),
    _question(
        "geo2",
        "Which state in India has the longest coastline?",
        ["Tamil Nadu", "Gujarat", "Andhra Pradesh", "Maharashtra"],
        1,
        "Gujarat has the longest coastline in India, stretching approximately 1,600 kilometers.",
        "Geography",
        "Coastal Geography",
        "medium",
    ),
    _question(
        "geo3",
        "The Tropic of Cancer passes through how many Indian states?",
        ["6", "7", "8", "9"],
        2,
        "The Tropic of Cancer passes through 8 Indian states: Gujarat, Rajasthan, Madhya Pradesh, Chhattisgarh, Jharkhand, West Bengal, Tripura, and Mizoram.",
        "Geography",
        "Astronomical Geography",
        "hard",
    ),
    _question(
        "eco1",
        "What is the repo rate set by RBI as of 2024?",
        ["6.25%", "6.50%", "6.75%", "7.00%"],
        1,
        "The Reserve Bank of India maintained the repo rate at 6.50% through 2024 to control inflation and support growth.",
        "Economy",
        "Monetary Policy",
        "medium",
    ),
    _question(
        "eco2",
        "Which organization publishes the Human Development Index (HDI)?",
        ["World Bank", "IMF", "UNDP", "WHO"],
        2,
        "The United Nations Development Programme (UNDP) publishes the Human Development Index annually.",
        "Economy",
        "Development Indicators",
        "medium",
    ),
    _question(
        "sci1",
        "Which Indian space mission successfully landed on the Moon's south pole in 2023?",
        ["Chandrayaan-2", "Chandrayaan-3", "Mangalyaan", "Aditya L1"],
        1,
        "Chandrayaan-3 landed near the Moon's south pole in August 2023, making India the fourth country to land on the Moon.",
        "Science & Technology",
        "Space Missions",
        "easy",
    ),
    _question(
        "sci2",
        "What is the full form of ISRO?",
        [
            "Indian Space Research Organisation",
            "Indian Scientific Research Organisation",
            "Indian Space Research Office",
            "Indian Scientific Research Office",
        ],
        0,
        "ISRO stands for Indian Space Research Organisation, India's national space agency.",
        "Science & Technology",
        "Space Organizations",
        "easy",
    ),
    _question(
        "curr1",
        "Which country held the G20 presidency in 2023?",
        ["Indonesia", "India", "Brazil", "South Africa"],
        1,
        "India held the G20 presidency in 2023 and hosted the G20 Summit in New Delhi in September 2023.",
        "Current Affairs",
        "International Relations",
        "easy",
    ),
    _question(
        "curr2",
        "What was the theme of India's G20 presidency in 2023?",
        [
            "One Earth, One Family, One Future",
            "Building a Sustainable Future",
            "Unity in Diversity",
            "Global Partnership for Growth",
        ],
        0,
        "India's G20 presidency theme was 'Vasudhaiva Kutumbakam', One Earth, One Family, One Future.",
        "Current Affairs",
        "International Relations",
        "medium",
    ),
    _question(
        "misc1",
        "Who wrote the Indian National Anthem 'Jana Gana Mana'?",
        ["Bankim Chandra Chattopadhyay", "Rabindranath Tagore", "Sarojini Naidu", "Subramanya Bharathi"],
        1,
        "Rabindranath Tagore wrote 'Jana Gana Mana', which was adopted as India's National Anthem in 1950.",
        "History",
        "National Symbols",
        "easy",
    ),
    _question(
        "misc2",
        "Which is the largest state in India by area?",
        ["Madhya Pradesh", "Uttar Pradesh", "Rajasthan", "Maharashtra"],
        2,
        "Rajasthan is the largest state in India by area, covering 342,239 square kilometers.",
        "Geography",
        "Indian States",
        "easy",
    ),
    _question(
        "misc3",
        "What is the minimum age to become the Prime Minister of India?",
        ["25 years", "30 years", "35 years", "No minimum age"],
        0,
        "The minimum age to become Prime Minister is 25 years, as one must be eligible to be a member of Lok Sabha.",
        "Polity",
        "Executive",
        "medium",
    ),
    _question(
        "misc4",
        "Which Indian scientist is known as the 'Missile Man of India'?",
        ["C.V. Raman", "A.P.J. Abdul Kalam", "Homi Bhabha", "Vikram Sarabhai"],
        1,
        "Dr. A.P.J. Abdul Kalam is known as the 'Missile Man of India' for his work on ballistic missile and launch vehicle technology.",
        "Science & Technology",
        "Indian Scientists",
        "easy",
    ),
    _question(
        "adv1",
        "Which article of the Constitution deals with the procedure for amendment?",
        ["Article 356", "Article 368", "Article 370", "Article 371"],
        1,
        "Article 368 deals with the power of Parliament to amend the Constitution and the procedure thereof.",
        "Polity",
        "Constitutional Amendments",
        "hard",
    ),
    _question(
        "adv2",
        "Who was the first Indian to win a Nobel Prize?",
        ["C.V. Raman", "Rabindranath Tagore", "Mother Teresa", "Amartya Sen"],
        1,
        "Rabindranath Tagore was the first Indian to win a Nobel Prize, receiving the Nobel Prize in Literature in 1913.",
        "History",
        "Achievements",
        "medium",
    ),
    _question(
        "adv3",
        "Which constitutional body conducts elections in India?",
        ["Supreme Court", "Election Commission", "Parliament", "President"],
        1,
        "The Election Commission of India is the constitutional body responsible for conducting free and fair elections.",
        "Polity",
        "Constitutional Bodies",
        "easy",
    ),
    _question(
        "adv4",
        "What is the full form of NITI Aayog?",
        [
            "National Institution for Transforming India",
            "National Institute for Technology Innovation",
            "National Integration and Technology Initiative",
            "National Investment and Trade Initiative",
        ],
        0,
        "NITI Aayog stands for National Institution for Transforming India, which replaced the Planning Commission in 2015.",
        "Economy",
        "Government Institutions",
        "medium",
    ),
    _question(
        "ff1",
        "Bhagat Singh was associated with which revolutionary organization?",
        ["Anushilan Samiti", "Hindustan Socialist Republican Association", "Ghadar Party", "Azad Hind Fauj"],
        1,
        "Bhagat Singh was a prominent member of the Hindustan Socialist Republican Association (HSRA).",
        "History",
        "Freedom Fighters",
        "medium",
    ),
    _question(
        "ff2",
        "Who threw a bomb in the Central Legislative Assembly along with Bhagat Singh?",
        ["Rajguru", "Sukhdev", "Batukeshwar Dutt", "Chandrashekhar Azad"],
        2,
        "Batukeshwar Dutt threw bombs in the Central Legislative Assembly along with Bhagat Singh on April 8, 1929.",
        "History",
        "Freedom Fighters",
        "hard",
    ),
    _question(
        "curr3",
        "Which Indian city hosted the Chess Olympiad in 2022?",
        ["New Delhi", "Mumbai", "Chennai", "Bangalore"],
        2,
        "Chennai hosted the 44th Chess Olympiad in 2022, the first time India hosted the event.",
        "Current Affairs",
        "Sports",
        "medium",
    ),
    _question(
        "curr4",
        "What is the name of India's instant payment system developed by NPCI?",
        ["IMPS", "UPI", "NEFT", "RTGS"],
        1,
        "UPI (Unified Payments Interface) is India's instant real-time payment system developed by NPCI.",
        "Economy",
        "Digital India",
        "easy",
    ),
    _question(
        "env1",
        "Which gas is primarily responsible for the greenhouse effect?",
        ["Oxygen", "Nitrogen", "Carbon Dioxide", "Hydrogen"],
        2,
        "Carbon dioxide is the primary greenhouse gas responsible for global warming and climate change.",
        "Science & Technology",
        "Environment",
        "easy",
    ),
    _question(
        "env2",
        "What is the full form of CRISPR in biotechnology?",
        [
            "Clustered Regularly Interspaced Short Palindromic Repeats",
            "Cellular Research in Systematic Protein Regulation",
            "Controlled Replication in Systematic Protein Research",
            "Cellular Regulation in Systematic Protein Repeats",
        ],
        0,
        "CRISPR stands for Clustered Regularly Interspaced Short Palindromic Repeats, a gene-editing technology.",
        "Science & Technology",
        "Biotechnology",
        "hard",
    ),
]


CHALLENGE_QUESTIONS = [
    {
        "question": "Which Indian state is known as 'God's Own Country'?",
        "options": ["Tamil Nadu", "Kerala", "Karnataka", "Goa"],
        "correct_answer": 1,
        "explanation": "Kerala is famously known as 'God's Own Country' due to its natural beauty.",
        "difficulty": "easy",
    },
    {
        "question": "The Bharat Ratna is India's highest civilian award. Who was the first recipient?",
        "options": ["Mahatma Gandhi", "C. Rajagopalachari", "S. Radhakrishnan", "C.V. Raman"],
        "correct_answer": 1,
        "explanation": "C. Rajagopalachari was among the first recipients of the Bharat Ratna in 1954.",
        "difficulty": "medium",
    },
    {
        "question": "Which Indian city is known as the 'Silicon Valley of India'?",
        "options": ["Hyderabad", "Chennai", "Bangalore", "Pune"],
        "correct_answer": 2,
        "explanation": "Bangalore is known as the Silicon Valley of India due to its IT industry.",
        "difficulty": "easy",
    },
    {
        "question": "The Gateway of India was built to commemorate the visit of which British monarch?",
        "options": ["Queen Victoria", "King George V", "King Edward VII", "Queen Elizabeth I"],
        "correct_answer": 1,
        "explanation": "The Gateway of India was built to commemorate King George V's visit to India.",
        "difficulty": "medium",
    },
    {
        "question": "Which is the longest river in India?",
        "options": ["Yamuna", "Ganga", "Godavari", "Brahmaputra"],
        "correct_answer": 1,
        "explanation": "The Ganga is the longest river in India, flowing about 2,525 kilometers.",
        "difficulty": "easy",
    },
]


SUGGESTED_TOPICS = [
    "Indian History and Freedom Struggle",
    "Science and Technology",
    "Geography of India",
    "Mathematics and Logic",
    "Literature and Arts",
    "Current Affairs and Politics",
]


POPULAR_TOPICS = [
    {
        "name": "Indian History and Freedom Struggle",
        "category": "History",
        "popularity": 95,
        "examRelevance": "UPSC, SSC, State PCS",
    },
    {
        "name": "Indian Constitution and Polity",
        "category": "Polity",
        "popularity": 92,
        "examRelevance": "UPSC, Banking, SSC",
    },
    {
        "name": "Geography of India",
        "category": "Geography",
        "popularity": 88,
        "examRelevance": "UPSC, Railway, SSC",
    },
    {
        "name": "Current Affairs",
        "category": "Current Affairs",
        "popularity": 96,
        "examRelevance": "All Competitive Exams",
    },
    {
        "name": "Economics and Banking",
        "category": "Economics",
        "popularity": 85,
        "examRelevance": "Banking, UPSC, SSC",
    },
    {
        "name": "Science and Technology",
        "category": "Science",
        "popularity": 90,
        "examRelevance": "UPSC, Railway, SSC",
    },
    {
        "name": "Quantitative Aptitude",
        "category": "Mathematics",
        "popularity": 87,
        "examRelevance": "Banking, SSC, Railway",
    },
    {
        "name": "English Language and Comprehension",
        "category": "English",
        "popularity": 83,
        "examRelevance": "All Competitive Exams",
    },
]
